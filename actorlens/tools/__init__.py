"""
Tool Integration Layer.

Tool adapters expose actorlens operations as named tools with JSON-schema
inputs, ready to be registered by an MCP server or an LLM tool-use loop.
"""
