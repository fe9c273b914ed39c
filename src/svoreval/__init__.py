"""
svoreval - Repeated train/test evaluation of ordinal SVMs.

Split a labeled dataset, score a majority-class baseline, shell out to an
ordinal SVM, and summarize the trials.
"""

from svoreval.experiment import TrialAggregator, run_experiment

__version__ = "0.1.0"
__all__ = ["TrialAggregator", "run_experiment", "__version__"]
