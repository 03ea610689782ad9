"""
Pressroom Backend — Pydantic Request/Response Schemas
=======================================================

What:  The API contract: payload schemas validate input, response schemas
       shape output.
Why:   Separate from the SQLAlchemy models so the wire format can change
       independently of the tables and internal columns never leak.

Conventions:
    - <Entity>Payload:  request body for create AND update (full replace:
                        every required field must be sent every time)
    - <Entity>Response: serialized entity, built with from_attributes
"""
