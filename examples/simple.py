import sys

from cliparser import CLIParser, OptionRule, ParseBoolean, ParseInteger
from cliparser.utils import setup_logging

setup_logging()

parser = CLIParser(sys.argv, usage="simple.py [options] command -- files")
parser.set_allowed_options(
    {
        "count": OptionRule(
            validator=ParseInteger(minimum=1),
            default=1,
            value_label="N",
            description="Repeat the command N times",
        ),
        "name": OptionRule(value_label="NAME", description="Who to greet"),
        "verbose": OptionRule(validator=ParseBoolean(), description="Chatty output"),
        "help": None,
    }
)
parser.set_allowed_flags({"n": "name", "v": "verbose", "h": "help"})
parser.set_strict_mode(True)

# Entry point
if __name__ == "__main__":
    if not parser.parse():
        for error in parser.get_errors():
            print(error)
        parser.render_usage()
        sys.exit(2)

    options = parser.get_options()
    if options.get("help"):
        parser.render_usage()
        sys.exit(0)

    for _ in range(int(options["count"])):
        print(f"hello {options.get('name', 'world')}: {parser.get_commands()}")
    if options.get("verbose"):
        print(f"files: {parser.get_arguments()}")
