"""nxapi-cli — client and CLI for the NX-API device management interface."""

__version__ = "0.1.0"
