"""
Session Notes.

- core/: Configuration, logging, errors, database engine
- models/: SQLAlchemy table mapping for session notes
- schemas/: Pydantic shapes (drafts, confirmed notes, result envelope)
- services/: Draft validation and form state
- gateway/: Remote store adapter
- repositories/: In-memory ordered note collection
"""
