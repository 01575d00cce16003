from rich.pretty import pprint

from argot import *

arguments = Arguments(
    Expectation("port, p", default=8080, description="Port to listen on.", convertor=int),
    Expectation("host", default="localhost", description="Interface to bind."),
    {"name": "debug, d", "default": False, "description": "Verbose diagnostics.", "convertor": bool},
)
arguments.set_description("Tiny development server.")
arguments.set_version("v1.0.0")


if __name__ == '__main__':
    with handle():
        if arguments.should_help():
            arguments.trigger_help_exception()
        if not 0 < arguments.get("port") < 65536:
            raise Arguments.create_value_exception("port must be between 1 and 65535")
        pprint({"host": arguments.get("host"), "port": arguments.get("port"), "debug": arguments.get("debug")})
