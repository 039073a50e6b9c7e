"""
Shared infrastructure: configuration-aware database plumbing, logging,
exceptions, middleware and phone-number helpers.
"""
