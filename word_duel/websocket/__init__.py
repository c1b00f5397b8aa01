"""
WebSocket Package

Socket.IO event handlers for rooms and games.
"""
