# Supabase tables: profiles, auth.users
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py
# Authentication is handled by Supabase Auth (auth.users table)

"""
Expected Supabase table structure:

profiles:
- id: uuid (primary key, references auth.users.id)
- email: text (nullable) - copied from auth.users by the trigger
- first_name: text (nullable)
- last_name: text (nullable)
- full_name: text (nullable) - "first last", or the OAuth display name until edited
- username: text (nullable)
- phone_number: text (nullable)
- avatar_url: text (nullable)
- home_airport: text (nullable) - IATA code
- status: text (not null, default: 'pending') - values: pending, approved, rejected
- role: text (not null, default: 'user') - values: user, admin
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

A handle_new_user trigger on auth.users inserts the profile row, so a brand-new
account can briefly exist without one. status and role are only writable by admins.
"""
