# Constants and unit helpers
