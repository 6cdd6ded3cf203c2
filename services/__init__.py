"""Business logic service layer.

This package groups higher-level operations that coordinate multiple models or
perform validation and queries. Route handlers stay thin and delegate here.

Import from the individual modules. `mandatory_tools`, `errors`,
`validation` and `patches` have no Flask dependency and are shared with the
`client` package, so nothing server-side is imported at package level.
"""
