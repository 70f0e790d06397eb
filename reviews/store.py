import logging

from django.core.exceptions import ValidationError
from django.db import DatabaseError, IntegrityError, transaction
from rest_framework.exceptions import NotFound

from authentication.exceptions import Conflict, UpstreamFailure, is_unique_violation

logger = logging.getLogger(__name__)


class EntityStore:
    """
    CRUD access to one table.

    Store errors come back classified: a uniqueness violation raises Conflict,
    a missing row raises NotFound and any other database error raises
    UpstreamFailure. Writes run in a savepoint so a failed insert or update
    leaves the connection usable and the stored row untouched.
    """

    def __init__(self, model, not_found_message, conflict_message):
        self.model = model
        self.not_found_message = not_found_message
        self.conflict_message = conflict_message

    def select(self, filters=None, order=('-created_at',)):
        queryset = self.model.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return queryset.order_by(*order)

    def find(self, pk):
        try:
            return self.model.objects.filter(pk=pk).first()
        except (ValidationError, ValueError):
            return None
        except DatabaseError as exc:
            logger.error(f"Failed to read {self.model.__name__} {pk}: {exc}")
            raise UpstreamFailure() from exc

    def get(self, pk):
        obj = self.find(pk)
        if obj is None:
            raise NotFound(self.not_found_message)
        return obj

    def insert(self, fields):
        obj = self.model(**fields)
        self._write(obj.save, f"insert {self.model.__name__}", force_insert=True)
        return obj

    def update(self, obj, fields):
        for attr, value in fields.items():
            setattr(obj, attr, value)
        self._write(obj.save, f"update {self.model.__name__} {obj.pk}")
        return obj

    def delete(self, obj):
        self._write(obj.delete, f"delete {self.model.__name__} {obj.pk}")

    def _write(self, operation, description, **kwargs):
        try:
            with transaction.atomic():
                operation(**kwargs)
        except IntegrityError as exc:
            if is_unique_violation(exc):
                raise Conflict(self.conflict_message) from exc
            logger.error(f"Integrity error during {description}: {exc}")
            raise UpstreamFailure() from exc
        except DatabaseError as exc:
            logger.error(f"Database error during {description}: {exc}")
            raise UpstreamFailure() from exc
