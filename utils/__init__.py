"""
utils/ - Logging and SQL building helpers
"""
