"""
Global constants and configuration parameters for PyDEMGrid.

This module centralises the few runtime parameters used by the grid container.
Values are read at call time, so they can be changed after import:

    import pydemgrid.constants as cte
    cte.REPORT_RAM = False  # silence the resize RAM advisory

Constant Categories:
- Metadata Constants: sentinel used for metadata that has not been set yet
- Diagnostic Constants: control of the advisory output printed on resize

Author: B.G.
"""

#########################################
###### METADATA CONSTANTS ###############
#########################################

# Sentinel for metadata that has not been set (cellsize, corners, data cell count)
# Also the no-data sentinel of signed and floating element types
UNSET = -1


#########################################
###### DIAGNOSTIC CONSTANTS #############
#########################################

# Print the approximate RAM requirement to stderr each time a grid is resized
REPORT_RAM = True

# Bytes in one megabyte for the RAM advisory (binary megabyte)
BYTES_PER_MB = 1024 * 1024
