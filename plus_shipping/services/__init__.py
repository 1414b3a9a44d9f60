"""
Application services.
"""
