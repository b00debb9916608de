#!/usr/bin/env python3

"""
Release Tag Resolver CLI

Resolves, for each configured release branch, the version tags already
published and the channels they were published to, and prints the result.
All resolution logic is in pure functions, all I/O is in the I/O layer.
"""

import json
import logging
import os
import sys

from .channel_accumulator import get_tags
from .environment import EnvironmentConfig
from .exceptions import ResolverError
from .git_operations import open_repository
from .io_layer import IOLayer
from .report import format_summary
from .utils import setup_logging

logger = logging.getLogger(__name__)


def main():
    """Main entry point."""
    try:
        # Step 1: Parse environment
        config = EnvironmentConfig.from_env(os.environ)
        setup_logging(logging.DEBUG if config.debug else logging.INFO)

        # Step 2: Setup I/O layer
        repo = open_repository(config.repo_path)
        io_layer = IOLayer(repo, remote=config.remote)

        # Step 3: Apply config file and validate
        if config.config_file:
            config = config.merge_file_config(io_layer.read_yaml(config.config_file))

        errors = config.validate()
        if errors:
            for error in errors:
                print(f"Error: {error}")
            sys.exit(1)

        resolve_config = config.to_resolve_config()
        logger.info(f"Tag format: {resolve_config.tag_format}")
        logger.info(f"Branches: {', '.join(resolve_config.branches)}")

        # Step 4: Resolve tags
        entries = get_tags(resolve_config, io_layer)

        # Step 5: Output
        if config.output_format == "text":
            print(format_summary(entries))
        else:
            print(json.dumps([entry.to_dict() for entry in entries], indent=2))
    except ResolverError as e:
        print(f"Error: {e}")
        sys.exit(1)
    except Exception as e:
        print(f"Unexpected error: {e}")
        sys.exit(1)

if __name__ == "__main__":
    main()
