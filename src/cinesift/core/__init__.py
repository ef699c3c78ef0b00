"""Core pipeline — Result materialization, pagination and orchestration."""
