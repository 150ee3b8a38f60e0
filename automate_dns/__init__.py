"""automate-dns — resolver registry with Cloudflare A-record sync."""

__version__ = "0.1.0"

SERVICE_NAME = "automate-dns"
