"""Client library for the DigitalOcean v2 API: firewalls, floating IPs, images and SSH keys."""

__version__ = "1.16.0"