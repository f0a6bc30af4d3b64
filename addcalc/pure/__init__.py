"""Token-level pipeline: tokenizing, validating, postfix conversion and evaluation."""
