"""
High-level use cases for the dashboard.

Each service module validates input and orchestrates repositories (create a
user, rename a role, log in, check a permission). Routers and scripts call
these services instead of manipulating the store directly.
"""
