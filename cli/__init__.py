import argparse
import cli.config
import cli.keys
import cli.docs
from cli.convert import setup_convert_parser
from cli.helpers import setup_logging


def create_parser():
    parser = argparse.ArgumentParser(
        prog='smartmd',
        description='smartmd - Convert PDFs to Markdown with vision models and a pooled set of API keys',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Configuration (run first!)
  smartmd init                            # Write config.yaml, print a secret key hint
  smartmd config show                     # Show current config
  smartmd config set keypool.cooldown_seconds 90   # Change one value

  # API key pool
  smartmd keys add glm                    # Prompts for the key
  smartmd keys add claude --key sk-ant-...
  smartmd keys list
  smartmd keys status --provider glm      # Availability and cooldowns
  smartmd keys toggle 3f2a                # Enable/disable by ID prefix
  smartmd keys remove 3f2a

  # Conversion
  smartmd convert paper.pdf
  smartmd convert paper.pdf --provider claude --dpi 200 -o paper.md

  # Documents
  smartmd docs list
  smartmd docs show <doc-id>
  smartmd docs export <doc-id> -o paper.md
  smartmd docs delete <doc-id> --yes
"""
    )

    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')

    subparsers = parser.add_subparsers(dest='command', help='Command')
    subparsers.required = True

    cli.config.setup_parser(subparsers)
    cli.keys.setup_parser(subparsers)
    setup_convert_parser(subparsers)
    cli.docs.setup_parser(subparsers)

    return parser


def main():
    parser = create_parser()
    args = parser.parse_args()
    setup_logging(verbose=args.verbose)
    args.func(args)
