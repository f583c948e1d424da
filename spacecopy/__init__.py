"""spacecopy: copy Kibana saved objects between spaces as a tracked resource."""

__version__ = "0.1.0"
