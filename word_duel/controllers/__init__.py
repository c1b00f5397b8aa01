"""
Controllers Package

HTTP blueprints for rooms and the word dictionary.
"""
