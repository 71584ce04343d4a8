"""Building blocks for HTTP and WebSocket servers: response writing, header parsing, permessage-deflate streams, option parsing and file streaming."""

__version__ = "0.1.0"