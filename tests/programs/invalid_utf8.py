import sys

sys.stdout.buffer.write(b"\xff\xfe7\n")
sys.stderr.buffer.write(b"\xc3 broken\n")
