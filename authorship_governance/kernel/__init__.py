"""
Kernel layer

Cross-cutting infrastructure the governance flows depend on:
- Append-only audit event contract (kernel.events)
"""
