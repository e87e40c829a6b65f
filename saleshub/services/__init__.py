"""
Request-level services composing analysis, LLM providers and persistence
"""
