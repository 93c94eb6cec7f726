"""
Campaign Story Builder - main entry point.

    python main.py serve --port 3001
    python main.py questions
    python main.py generate --answers answers.json --tone hopeful
    python main.py export --session session.json --format csv

Equivalent to the installed `campaign-story` command.
"""

import sys

from campaign_story.cli import main


if __name__ == "__main__":
    sys.exit(main())
