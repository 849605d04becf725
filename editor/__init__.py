"""
Core modules for the Robot Block Editor
=======================================

This package contains the editor's non-GUI logic:
- blocks: block variants, their edit-time shapes and renderers
- workspace: positioned block stacks and tree editing
- toolbox: block palette grouped by category
- fragments/printer: rendered lines and the indentation-aware printer
- generator: workspace to Python source
- serializer: workspace to/from the JSON project document
- session: in-memory project state
- project: open/create/save/deploy operations
- dialogs: dialog interface used by the project operations
- settings: settings.json loading
- logger: centralized logging
"""
