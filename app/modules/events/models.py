# Supabase table: event_table (name configurable via EVENTS_TABLE)
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: bigint / uuid (primary key, generated)
- event_name: text
- event_date: date ("YYYY-MM-DD")
- event_time: time ("HH:MM:SS")
"""
