from .rest_client import RestClient, RestMethod, RestResponse
