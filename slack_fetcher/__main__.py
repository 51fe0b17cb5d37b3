#!/usr/bin/env python3
"""
Main execution module for the Slack message fetcher
"""

from slack_fetcher.cli.commands import main

if __name__ == "__main__":
    main()
