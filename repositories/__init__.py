"""
repositories/ - Data Access Layer
==================================
One repository per table. Each receives the shared Database at construction,
builds parameterized SQL and returns Company / Job model objects.
"""
