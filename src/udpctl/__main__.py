from udpctl.cli import cli

cli()
