"""Core domain package for the comment-command bot.

Core contains command matching, dispatch and external service invocation
without any GitHub or HTTP-library specific code, keeping the logic portable.
"""
