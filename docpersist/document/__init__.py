"""
Document module for declaring documents and inserting them into MongoDB.

This module provides functionality for:
- Declaring stored fields (Field) on Document and EmbeddedDocument classes
- Tracking changes to fields between writes
- Validation before inserting
- Mapping Document classes to MongoDB collections
"""
