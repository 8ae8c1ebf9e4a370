"""Pure domain helpers: input validation and typed operation results."""
