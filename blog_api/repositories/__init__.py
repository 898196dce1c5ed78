# Repositories package.
#
# A repository issues the SQL for one entity and nothing else:
#
#   blog_repository  - CRUD + search queries for Blog
#
# Repositories flush but never commit; the transaction boundary is owned
# by the ``get_db`` dependency in the router layer.
