"""
Supabase integration module
Token verification (Auth) and table access (PostgREST)

Import directly:
    from saleshub.store.supabase_client import SupabaseClient, supabase_client
"""
