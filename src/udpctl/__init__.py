"""udpctl — interactive endpoint for exercising a UDP datagram socket."""

__version__ = "0.1.0"
