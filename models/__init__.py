"""
models/ - Domain records (Company, Job)
"""
