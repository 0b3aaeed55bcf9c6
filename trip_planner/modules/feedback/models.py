# Supabase tables: feedback, feedback_comments
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

feedback:
- id: uuid (primary key)
- user_id: uuid (foreign key to profiles.id, not null)
- title: text (not null)
- description: text (not null)
- type: text (not null) - values: bug, feature_request, general
- status: text (not null, default: 'open') - values: open, in_progress, closed
- created_at: timestamp (default: now())

feedback_comments:
- id: uuid (primary key)
- feedback_id: uuid (foreign key to feedback.id, on delete cascade)
- user_id: uuid (foreign key to profiles.id, not null)
- content: text (not null)
- created_at: timestamp (default: now())

RLS: any approved user reads everything and writes their own rows;
only admins may update feedback.status.
"""
