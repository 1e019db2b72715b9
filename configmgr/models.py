from django.db import models

class SystemSetting(models.Model):
    """
    Simple key/value settings store for runtime overrides.
    Known keys:
      - DEFAULT_SLOT_INTERVAL (e.g., '30'): step used when a salon has no interval set
    """
    DEFAULT_SLOT_INTERVAL = "DEFAULT_SLOT_INTERVAL"

    key = models.CharField(max_length=100, unique=True)
    value = models.CharField(max_length=200)

    def __str__(self):
        return f"{self.key}={self.value}"
