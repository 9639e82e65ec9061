"""buildset core -- errors, structured logging and settings shared by every layer.

Architecture::

    errors.py          Structured error hierarchy (BuildSetError and friends)
    logging.py         structlog configuration + scoped log context
    config/            BuildSetSettings (pydantic-settings) + .env discovery
"""
