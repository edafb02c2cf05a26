import json
import logging
from datetime import date, datetime
from decimal import Decimal
from uuid import UUID
from django.contrib.contenttypes.models import ContentType
from django.db import DatabaseError, transaction
from acadtrack.action_logs.models.action_log import ActionLog

logger = logging.getLogger(__name__)


class CustomJSONEncoder(json.JSONEncoder):
    """JSON encoder that handles Decimal, date, UUID and model instances"""

    def default(self, obj):
        if isinstance(obj, Decimal):
            return float(obj)
        elif isinstance(obj, (date, datetime)):
            return obj.isoformat()
        elif isinstance(obj, UUID):
            return str(obj)
        elif hasattr(obj, "pk"):  # Model instance
            return {"model": obj.__class__.__name__, "id": str(obj.pk), "str": str(obj)}
        return super().default(obj)


def log_action(user, action, category, obj=None, metadata=None):
    """
    Persist an audit entry for ``action``.

    A failing audit write is logged and swallowed so it never undoes the
    operation being audited.
    """
    if user is not None and (not user.is_authenticated or user.pk is None):
        user = None

    content_type = None
    object_id = None
    if obj is not None:
        content_type = ContentType.objects.get_for_model(obj)
        object_id = str(obj.pk)

    try:
        processed_metadata = json.loads(json.dumps(metadata or {}, cls=CustomJSONEncoder))
    except (TypeError, ValueError) as e:
        logger.warning("Failed to serialize metadata for %r: %s", action, e)
        processed_metadata = {"error": "Failed to serialize metadata"}

    try:
        # Savepoint so a failed write does not break the caller's transaction
        with transaction.atomic():
            return ActionLog.objects.create(
                user=user,
                action=action,
                category=category,
                content_type=content_type,
                object_id=object_id,
                metadata=processed_metadata,
            )
    except DatabaseError as e:
        logger.warning("Failed to create action log for %r: %s", action, e)
        return None
