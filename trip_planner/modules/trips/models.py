# Supabase tables: trips, trip_activities, trip_activity_participants, trip_participants
# Supabase function: get_user_trips(query_user_id uuid)
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

trips:
- id: uuid (primary key)
- name: text (not null)
- description: text (nullable)
- start_date: date (nullable)
- end_date: date (nullable)
- is_public: boolean (default: false)
- locations: text[] (default: '{}')
- owner_id: uuid (foreign key to profiles.id, not null)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

trip_activities:
- trip_id: uuid (foreign key to trips.id, on delete cascade)
- activity_id: uuid (foreign key to activities.id, on delete cascade)
- primary key (trip_id, activity_id)

trip_activity_participants:
- id: uuid (primary key)
- trip_id: uuid (foreign key to trips.id, on delete cascade)
- activity_id: uuid (foreign key to activities.id, on delete cascade)
- user_id: uuid (foreign key to profiles.id, on delete cascade)
- created_at: timestamp (default: now())
- unique constraint on (trip_id, activity_id, user_id)

trip_participants:
- id: uuid (primary key)
- trip_id: uuid (foreign key to trips.id, on delete cascade)
- user_id: uuid (foreign key to profiles.id)
- status: text (not null, default: 'going') - values: going, declined
- role: text (not null, default: 'member') - values: owner, member
- arrival_date: date (nullable)
- departure_date: date (nullable)
- guests: jsonb (default: '[]') - list of {name, age}
- unique constraint on (trip_id, user_id)

get_user_trips(query_user_id uuid) returns setof trips:
    trips owned by the user, plus trips in which the user has joined at least
    one activity or has a participant row. Ordering is defined by the function.
"""
