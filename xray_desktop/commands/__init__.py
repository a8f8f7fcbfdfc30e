"""Click subcommands, one module per bridge operation."""
