"""LLM integration layer.

This package is intentionally small:
- No prompt/output logging (learner and member text stays out of logs).
- Configured through the app's Settings object.
- Treated as a stateless, single-call collaborator by callers.
"""
