"""Assistant domain - intent detection, per-domain agents, and orchestration."""
