"""
Coinbase Advanced Trade endpoint functions

Each function takes an authenticated request function as its first argument:
    await request_func(method, endpoint, params=None, data=None) -> decoded JSON
CbClient provides one and exposes every function as a method.
"""
