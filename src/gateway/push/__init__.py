"""
Browser push notifications: subscriptions and delivery fan-out.
"""
