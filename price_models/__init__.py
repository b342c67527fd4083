"""
Cross-validated selection between linear and random forest price models.

Pipeline:
    dataset -> split (train / holdout)
            -> make_folds (train only)
            -> evaluate each (config, fold)
            -> select_best (lowest mean RMSE, first-listed wins ties)
            -> finalize (refit on train, score holdout once)

Usage:
    from price_models.data import make_linear_dataset
    from price_models.selection import default_configs, run_workflow

    result = run_workflow(make_linear_dataset(1000), default_configs(seed=1126))
    print(result.selection.best_config.label, result.final.rmse)
"""

__version__ = "0.1.0"
