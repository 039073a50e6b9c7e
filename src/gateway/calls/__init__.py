"""
Persisted call records: portal-side updates and deletes.
"""
