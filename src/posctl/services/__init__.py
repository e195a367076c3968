"""Service layer — validated state transitions over the store.

Services return domain records and raise domain errors; the CLI turns both
into ServiceResult envelopes.
"""
