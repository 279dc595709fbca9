from licenses.infrastructure.models import License, LicenseAccount  # noqa: F401
