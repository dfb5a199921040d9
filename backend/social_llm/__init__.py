"""Flavor text for simulated social interactions, generated by a local LLM."""
