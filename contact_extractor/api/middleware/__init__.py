"""
HTTP middleware
"""
