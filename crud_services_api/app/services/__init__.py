"""
Service layer.

Each service class owns the SQL of one domain and the database it runs
against (its ``database`` attribute names the service whose SQLite
file it opens).  API handlers only translate results and
``ValueError`` into HTTP responses.
"""
