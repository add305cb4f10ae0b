import time

_this_year = time.strftime("%Y")
__version__ = "0.1.0dev"
__license__ = "Apache-2.0"
__copyright__ = f"Copyright (c) 2024-{_this_year}, bapimap contributors"
