"""
Static site-structure auditing: link graphs and orphan detection for local HTML corpora.
"""
