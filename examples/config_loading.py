import sys
from pathlib import Path

from cliparser import CLIParser
from cliparser.utils import setup_logging

setup_logging()

config_path = Path(__file__).parent / "deploy.yaml"
parser = CLIParser.from_config(sys.argv, config_path)

if __name__ == "__main__":
    if not parser.parse():
        for error in parser.get_errors():
            print(error)
        parser.render_usage()
        sys.exit(2)
    print(parser.get_options())
    print(parser.get_commands())
