from carhunter.clients.http import HttpClient, HttpRequestError

__all__ = ["HttpClient", "HttpRequestError"]
