"""Services package - persistence logic for Recipe Vault.

Architecture:
- Services: Stateless async functions organized by concern
- Transactions: Managed via the session_scope() async context manager
- Exceptions: Consistent error handling via the ServiceError hierarchy
- Validation: Input validation before any write

Service Modules:
- import_service: Atomic import of a recipe, its ingredients and the user link
- recipe_service: Recipe upsert, full update, cascade delete and reads
- ingredient_service: Atomic ingredient upsert and reads
- link_service: Insert-if-absent association rows
- patch_service: Partial recipe updates against a field whitelist

Infrastructure:
- database: Engine, pool lifecycle and session management
- exceptions: Service layer exception classes
- logging_utils: Structured operation logging
- dto: Import payload parsing
"""
