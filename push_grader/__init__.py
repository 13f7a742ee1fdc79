"""
Push Grader: CI homework checks driven by a GitHub push

Reviews pushed homework code with a language model and runs the detected
student program against model-authored test cases.
"""

__version__ = "0.1.0"
