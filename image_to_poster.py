#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Split an image into printable poster sheets.
"""

# local repo modules
import poster_tiler.cli


if __name__ == "__main__":
	poster_tiler.cli.main()
