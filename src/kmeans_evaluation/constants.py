"""Constants for k-means evaluation."""

SEED = 12345
DEFAULT_MAX_ITER = 100

DEFAULT_MIN_K = 2
DEFAULT_MAX_K = 10
DEFAULT_SOLUTION_K = 3

CLUSTER_COLUMN = "Cluster"
CLUSTER_PREFIX = "Cluster_"
SKIPPED_LABEL = "Skipped"
CENTER_PREFIX = "Center_"
