"""
services/ - Request validation on top of the repositories
"""
