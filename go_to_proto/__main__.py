"""
Command line entry point: convert the structs of Go files to proto messages.

Example:

```
go-to-proto models.go events.go --stub Person:PersonProto > models.proto
```

Logging is configured from the environment with LOG_LEVEL, LOG_FILTERS,
LOG_JSON and LOG_THREAD_ID.
"""

# Standard
from typing import List, Optional
import argparse
import os
import sys

# First Party
import alog

# Local
from .go_to_proto import go_files_to_proto
from .proto_stubs import generate_stubs

log = alog.use_channel("MAIN")

USAGE = "Usage: go-to-proto <filename1.go> <filename2.go> ..."


def _stub_source(value: str) -> str:
    """Parse a STRUCT[:MESSAGE] pair and render its conversion stubs"""
    struct_name, _, proto_name = value.partition(":")
    try:
        return generate_stubs(struct_name, proto_name or struct_name)
    except ValueError as err:
        raise argparse.ArgumentTypeError(str(err)) from err


def _configure_logging():
    alog.configure(
        default_level=os.environ.get("LOG_LEVEL", "warning"),
        filters=os.environ.get("LOG_FILTERS", ""),
        formatter="json" if os.environ.get("LOG_JSON", "").lower() == "true" else "pretty",
        thread_id=os.environ.get("LOG_THREAD_ID", "").lower() == "true",
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="go-to-proto",
        description="Translate Go struct declarations to protobuf messages",
    )
    parser.add_argument("filenames", nargs="*", metavar="FILE", help="Go source files")
    parser.add_argument(
        "--stub",
        action="append",
        default=[],
        type=_stub_source,
        metavar="STRUCT[:MESSAGE]",
        help="Also print conversion function stubs for this struct/message pair",
    )
    args = parser.parse_args(argv)
    _configure_logging()

    if not args.filenames and not args.stub:
        print(USAGE)
        return 0

    failures = go_files_to_proto(args.filenames)
    log.debug("Finished with %d parse failures", len(failures))
    for stub_source in args.stub:
        sys.stdout.write(stub_source)
    return 0


if __name__ == "__main__":
    sys.exit(main())
