from license_requests.infrastructure.models import LicenseRequest  # noqa: F401
