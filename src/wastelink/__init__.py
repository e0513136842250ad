"""WasteLink - waste collection coordination backend.

Connects generators, transporters and recycling facilities. Recyclers scan a
transporter's QR code to claim the waste it has collected.
"""

__version__ = "0.1.0"

from wastelink.infrastructure.api.app import app

__all__ = ["app", "__version__"]
