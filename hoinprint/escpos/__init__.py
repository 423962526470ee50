"""
ESC/POS layer: command encoders and the bit-image rasterizer.

Nothing in this package performs I/O. Every encoder returns bytes (or
raises CommandValidationError); the Printer session sends them.
"""
