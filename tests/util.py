# This source code is part of the Pepcraft package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

from os.path import dirname, join, realpath
import requests


def data_dir(subdir):
    return join(dirname(realpath(__file__)), subdir, "data")


### Functions for conditional test skips ###

tested_urls = {}


def cannot_connect_to(url):
    if url not in tested_urls:
        try:
            requests.head(url, timeout=10)
            tested_urls[url] = False
        except requests.RequestException:
            tested_urls[url] = True
    return tested_urls[url]


class MockResponse:
    """
    A minimal stand-in for :class:`requests.Response`.
    """

    def __init__(self, status_code=200, json_data=None, text=None):
        self.status_code = status_code
        self._json_data = json_data
        self.text = text if text is not None else ""

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        if self._json_data is None:
            raise ValueError("No JSON object could be decoded")
        return self._json_data
