"""
Firestore trigger logic for worker aggregates.

Triggers:
- rating_trigger: Recomputes worker avgRating/ratingCount on review create, update, delete
- review_guard: Deletes duplicate reviews for the same job and customer (review write)
- job_triggers: Counts completed jobs (job update) and deletes a job's reviews (job delete)

Bindings to document events live in main.py.
"""
