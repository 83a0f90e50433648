"""Servicios de orquestación (reconciliación, dispatch, pipeline)."""
