"""Intent parsing and validation.

The intent layer converts a French chat message into a `ParsedIntent` (document type, known client,
project title), which is then used to answer the user or to seed a new quote/invoice draft.
"""
