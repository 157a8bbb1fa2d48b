"""Abstract base class for registrar providers."""

from abc import ABC, abstractmethod

from dynadot_updater.models import RecordSet


class RegistrarProvider(ABC):
    """Abstract registrar DNS interface."""

    @abstractmethod
    def fetch_records(self, domain: str) -> RecordSet:
        """Fetch the records currently published for a domain.

        Args:
            domain: The domain name (e.g., "example.com")

        Returns:
            The apex and subdomain records, duplicates removed

        Raises:
            FetchError: The read failed or the response was malformed
        """
        pass

    @abstractmethod
    def push_records(self, domain: str, records: RecordSet) -> str:
        """Replace every record of a domain with ``records``.

        Args:
            domain: The domain name (e.g., "example.com")
            records: The complete record set to publish

        Returns:
            The raw response text

        Raises:
            PushError: The write failed
        """
        pass
