"""
Store Admin Dashboard
"""
