"""jjflow: structured log, diff and staged workflows on top of the jj CLI."""
