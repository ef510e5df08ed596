"""
Aclarador - Plain Language Analyzer

Extracts readable text from a web page and runs it through a fixed
pipeline of agents that:
1. Classify the text and detect clarity issues
2. Rewrite it in plain language via the Groq completion API
3. Review grammar, style and SEO on the rewritten text
4. Validate and score the final result
"""

__version__ = "0.1.0"
