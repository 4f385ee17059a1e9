"""Domain services: one per remote stage, plus gating and history."""
