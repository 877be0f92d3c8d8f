"""
Accounts module - user accounts and profiles.

This module handles:
- UserProfile entity and domain logic
- Identity provider port (sign-up, token verification)
- Supabase identity adapter and Django ORM profile repository
- Account registration
"""
