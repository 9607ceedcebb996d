"""Site content service: public content API, admin panel API and session auth."""

__version__ = "1.0.0"
