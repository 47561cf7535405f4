"""Check orchestration, shared enums and the evaluation boundary."""
