#!/usr/bin/env python3

import click

from defevents.commands.config import config_cmd
from defevents.commands.events import events_handler, hunks_handler, tags_handler


@click.group()
@click.version_option(package_name='defevents')
def cli():
    """defevents - Change events for the definitions touched by a commit.

    Correlates a commit's diff with the symbol definitions found by ctags
    and emits modified/referenced events plus subscription updates for
    downstream notification systems.
    """
    pass


cli.add_command(events_handler, name='events')
cli.add_command(hunks_handler, name='hunks')
cli.add_command(tags_handler, name='tags')
cli.add_command(config_cmd)


def main():
    cli()

if __name__ == "__main__":
    main()
