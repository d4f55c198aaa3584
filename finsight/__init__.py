"""
FinSight Advisory - Source Package

The AI advisory layer of a personal-finance application: typed
request/response flows that turn structured financial facts into
prompts, call a generative model, and always hand back a well-formed
answer.

DESIGN PRINCIPLES:
1. Validate before the model sees anything
2. The model is called at most once per request
3. Every failure ends in a literal, user-safe answer
4. Every step is logged with a correlation ID
5. The model transport and the record store are swappable
"""

__version__ = "1.0.0"
__author__ = "FinSight Team"
