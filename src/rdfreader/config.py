"""
Reader configuration.

Settings can be given explicitly or read from the environment (and a ``.env``
file) with ``ReaderConfig.from_env``.
"""

import os
from enum import Enum

from dotenv import load_dotenv
from pydantic import BaseModel, Field


class UnmatchedPolicy(str, Enum):
    """What to do with triples no acceptor claims."""
    WARN = "warn"      # log, keep in OntologyAcceptor.unmatched, carry on
    ERROR = "error"    # fail the read


class ReaderConfig(BaseModel):
    """Configuration options for reading an ontology."""

    unmatched: UnmatchedPolicy = Field(default=UnmatchedPolicy.WARN, description="Policy for unclaimed triples")
    rdf_format: str = Field(default="xml", description="rdflib parser name used when no format is given")
    log_level: str = Field(default="WARNING", description="Log level applied by the command line tool")

    @classmethod
    def from_env(cls) -> "ReaderConfig":
        """
        Build a configuration from RDFREADER_* environment variables.

        Returns:
            ReaderConfig with defaults for any variable that is not set
        """
        load_dotenv()

        values = {}
        if os.getenv("RDFREADER_UNMATCHED"):
            values["unmatched"] = os.getenv("RDFREADER_UNMATCHED").lower()
        if os.getenv("RDFREADER_FORMAT"):
            values["rdf_format"] = os.getenv("RDFREADER_FORMAT")
        if os.getenv("RDFREADER_LOG_LEVEL"):
            values["log_level"] = os.getenv("RDFREADER_LOG_LEVEL").upper()
        return cls(**values)
