#!/usr/bin/env python3
"""
CLI tool for reading an OWL ontology and summarising its axioms.

Usage:
    owl-read ont/owl-rdf/one-some.owl
    owl-read --format turtle pizza.ttl
    owl-read --format owx ont/owl-xml/one-some.owx
    owl-read --strict --log-level DEBUG ont/owl-rdf/one-and.owl
"""

import argparse
import logging
import sys
from collections import Counter

from ontology import Ontology

from .config import ReaderConfig, UnmatchedPolicy
from .errors import ReaderError
from .reader import read


FORMATS = ["xml", "turtle", "nt", "n3", "json-ld", "owx"]


def summarise(ontology: Ontology, prefixes) -> None:
    """Print the ontology identity and the number of axioms of each kind."""
    print(f"Ontology IRI: {ontology.id.iri or '(none)'}")
    print(f"Version IRI:  {ontology.id.viri or '(none)'}")
    print(f"Prefixes:     {len(prefixes)}")
    print(f"Axioms:       {len(ontology)}")

    counts = Counter(annotated.kind for annotated in ontology)
    for kind, count in sorted(counts.items()):
        print(f"  {kind:<36} {count}")

    annotated = sum(1 for axiom in ontology if axiom.annotations)
    if annotated:
        print(f"  (of which annotated: {annotated})")


def main(argv=None):
    """Main CLI entry point."""
    defaults = ReaderConfig.from_env()

    parser = argparse.ArgumentParser(
        description="Read an OWL ontology and print a summary of its axioms",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Read RDF/XML
  owl-read ont/owl-rdf/one-some.owl

  # Read Turtle, failing on any triple that is not part of an axiom
  owl-read --format turtle --strict ontology.ttl

  # Read OWL/XML
  owl-read --format owx ont/owl-xml/one-some.owx

Environment:
  RDFREADER_UNMATCHED, RDFREADER_FORMAT and RDFREADER_LOG_LEVEL set the defaults
        """
    )

    parser.add_argument(
        "file",
        help="Path to the ontology document"
    )

    parser.add_argument(
        "--format",
        choices=FORMATS,
        default=defaults.rdf_format,
        help="Serialisation of the document: an rdflib parser name, or owx for OWL/XML"
    )

    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on triples that are not part of any axiom"
    )

    parser.add_argument(
        "--log-level",
        default=defaults.log_level,
        help="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format='%(levelname)s: %(message)s'
    )

    config = defaults.model_copy(update={
        "rdf_format": args.format,
        "log_level": args.log_level,
        "unmatched": UnmatchedPolicy.ERROR if args.strict else defaults.unmatched,
    })

    try:
        if args.format == "owx":
            from owx import read as read_owx
            ontology, prefixes = read_owx(args.file)
        else:
            ontology, prefixes = read(args.file, config=config)
    except (ReaderError, OSError) as e:
        print(f"❌ Error reading {args.file}: {e}")
        return 1

    summarise(ontology, prefixes)
    return 0


if __name__ == "__main__":
    sys.exit(main())
