"""
Core Layer - request handling for the schema-transformer server.

Modules:
- dispatcher: resolve, validate, invoke and wrap a single call
- channel: transport-agnostic receive/dispatch/send loop
"""
