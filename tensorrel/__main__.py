"""
Runs the tensorrel command line:

    py -m tensorrel add "int32[3,4]" "int32[4]"

See tensorrel.cmdline for the details.
"""
from .cmdline import main

if __name__ == '__main__':
	main()
