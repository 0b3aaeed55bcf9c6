# Supabase table: activities
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

activities:
- id: uuid (primary key)
- name: text (unique, not null)
- category: text (default: 'General')
- requires_gps: boolean (default: false) - activity needs a places search to pick a location
- created_at: timestamp (default: now())

RLS: readable by any approved user; insert/update/delete only for profiles with role = 'admin'.
"""
