"""
Tenant accounts and identity resolution.
"""
