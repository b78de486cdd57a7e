"""Package initialization for docmodel-markup.

The public entry points live in `docmodel_markup.markup` (facade) and
`docmodel_markup.handlers.markdown_content` (graph walker). Keeping this file
minimal avoids import cycles between the handlers and the facade.
"""

__all__ = []
