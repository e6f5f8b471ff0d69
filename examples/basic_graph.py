"""
Basic Object Graph Example

This example demonstrates the fundamental objectgraph concepts:
- Building a class together with its constructor dependencies
- Instances shared across the graph through the builder's cache
- Existing services supplied by an external lookup
- Alternate constructors and circular dependency reporting

Run this example:
    python examples/basic_graph.py
"""

import sys

from loguru import logger

from objectgraph import (
    CircularDependencyError,
    MappingServiceLookup,
    ObjectGraphBuilder,
    constructor,
)


# Step 1: Define Your Classes
# ===========================

class Settings:
    """Settings owned by the application, not by the builder."""

    def __init__(self, dsn: str):
        self.dsn = dsn


class Database:
    def __init__(self, settings: Settings):
        self.dsn = settings.dsn
        print(f"🗄️ Database connected to: {self.dsn}")


class AuditLog:
    def __init__(self):
        self.entries = []
        print("📝 AuditLog initialized")

    def record(self, message: str) -> None:
        self.entries.append(message)


class UserService:
    def __init__(self, db: Database, audit: AuditLog):
        self.db = db
        self.audit = audit
        print("👤 UserService initialized")


class ReportService:
    """Offers two constructors; the builder picks the one with more parameters."""

    def __init__(self):
        self.users = None

    @constructor
    def for_users(cls, users: UserService, audit: AuditLog) -> "ReportService":
        service = cls()
        service.users = users
        audit.record("reports enabled")
        return service


class Chicken:
    def __init__(self, egg: "Egg"):
        self.egg = egg


class Egg:
    def __init__(self, chicken: Chicken):
        self.chicken = chicken


# Step 2: Build the Graph
# =======================

def main() -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG")
    logger.enable("objectgraph")

    settings = Settings("postgresql://localhost/myapp")
    builder = ObjectGraphBuilder(MappingServiceLookup({Settings: settings}))

    reports = builder.build(ReportService)
    users = builder.build(UserService)

    print(f"✅ Report service shares the user service: {reports.users is users}")
    print(f"✅ Audit entries: {users.audit.entries}")
    print(f"✅ Cached types: {[t.__name__ for t in builder.cached_types]}")

    try:
        builder.build(Chicken)
    except CircularDependencyError as e:
        print(f"❌ {e}")


if __name__ == "__main__":
    main()
