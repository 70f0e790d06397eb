import logging

from django.core.files.storage import storages

from authentication.exceptions import Conflict, UpstreamFailure

logger = logging.getLogger(__name__)

IMAGE_STORAGE_ALIAS = "images"


class BlobStore:
    """Uploaded images addressed by key, backed by a Django storage alias."""

    def __init__(self, alias=IMAGE_STORAGE_ALIAS):
        self.alias = alias

    @property
    def storage(self):
        return storages[self.alias]

    def put(self, key, content, content_type):
        """Store content under key. Existing keys are never overwritten."""
        storage = self.storage
        try:
            if storage.exists(key):
                raise Conflict(f"An image named {key} already exists")
            content.content_type = content_type
            saved_name = storage.save(key, content)
        except OSError as exc:
            logger.error(f"Failed to store image {key}: {exc}")
            raise UpstreamFailure("Image upload failed") from exc

        if saved_name != key:
            # The backend picked another name because the key appeared meanwhile
            self.remove([saved_name])
            raise Conflict(f"An image named {key} already exists")
        return key

    def remove(self, keys):
        """
        Best-effort removal. Returns the keys that could not be removed
        instead of raising, so callers can carry on and report them.
        """
        failed = []
        for key in keys:
            try:
                self.storage.delete(key)
            except Exception:
                logger.exception("Failed to remove image %s", key)
                failed.append(key)
        if failed:
            logger.warning("Left %d orphaned image(s): %s", len(failed), ", ".join(failed))
        return failed

    def url(self, key):
        return self.storage.url(key)


blob_store = BlobStore()
