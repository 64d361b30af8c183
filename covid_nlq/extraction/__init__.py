"""Structured extraction from LLM output.

The extraction layer turns the raw text returned by the language model into a validated `CovidQuery`
record, which is then used to build a parameterized BigQuery query.
"""
