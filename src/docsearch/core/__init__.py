"""Core domain logic — document codec, query compiler, result projector, orchestration."""
