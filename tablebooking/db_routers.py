"""
Database routers for TableBooking.

Availability searches only read, so their queries may be spread across read
replicas. Writes, migrations and models that opt out via
``requires_primary_db`` always go to the primary.
"""

import random

from django.conf import settings


class ReplicationRouter:
    """
    Database router for read/write splitting.

    This router sends all write operations to the primary database
    and distributes read operations across replicas.
    """

    def _get_read_db(self):
        """Pick a replica alias at random, or the primary when none is configured."""
        replicas = [db for db in settings.DATABASES.keys() if db.startswith("replica")]
        if not replicas:
            return "default"

        return random.choice(replicas)

    def db_for_read(self, model, **hints):
        if getattr(model, "requires_primary_db", False):
            return "default"

        # Related-object reads stay on the connection the instance came from
        instance = hints.get("instance")
        if instance is not None and getattr(instance, "_state", None) and instance._state.db:
            return instance._state.db

        return self._get_read_db()

    def db_for_write(self, model, **hints):
        return "default"

    def allow_relation(self, obj1, obj2, **hints):
        return True

    def allow_migrate(self, db, app_label, model_name=None, **hints):
        return db == "default"
