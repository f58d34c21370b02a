# Copyright 2019 ICON Foundation
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""The Client Interface for REST call."""

import logging
from collections import namedtuple
from enum import Enum
from typing import NamedTuple, Optional, Any

import requests
from aiohttp import ClientSession, ClientTimeout
from jsonrpcclient import request as jsonrpc_request, parse as jsonrpc_parse, Ok

from kwiltx import utils, configure as conf
from kwiltx.blockchain.transactions.transaction import Transaction
from kwiltx.blockchain.transactions.transaction_serializer import TransactionSerializer

_RestMethod = namedtuple("_RestMethod", "version name params http_method result_key")


class RestMethod(Enum):
    GetAccount = _RestMethod(conf.ApiVersion.v1, "/accounts/{identifier}",
                             namedtuple("Params", "identifier"), "GET", "account")
    EstimatePrice = _RestMethod(conf.ApiVersion.v1, "/estimate_price",
                                namedtuple("Params", "tx"), "POST", "price")
    Account = _RestMethod(conf.ApiVersion.rpc, "user.account",
                          namedtuple("Params", "identifier"), "POST", None)
    EstimatePriceRpc = _RestMethod(conf.ApiVersion.rpc, "user.estimate_price",
                                   namedtuple("Params", "tx"), "POST", "price")


class RestResponse(NamedTuple):
    status: int
    data: Any = None


class RestClient:
    def __init__(self, provider: str = None, api_version: 'conf.ApiVersion' = None):
        self._api_version = api_version or conf.KWIL_API_VERSION
        self._target = utils.normalize_request_url(provider or conf.KWIL_PROVIDER, self._api_version)
        self._tx_serializer = TransactionSerializer()
        logging.info(f"RestClient init target({self._target})")

    @property
    def target(self):
        return self._target

    async def get_account(self, address: str) -> RestResponse:
        method = RestMethod.GetAccount if self._api_version == conf.ApiVersion.v1 else RestMethod.Account
        return await self.call_async(method, method.value.params(address))

    async def estimate_cost(self, tx: Transaction) -> RestResponse:
        method = RestMethod.EstimatePrice if self._api_version == conf.ApiVersion.v1 \
            else RestMethod.EstimatePriceRpc
        return await self.call_async(method, method.value.params(self._tx_serializer.to_raw_data(tx)))

    def call(self, method: RestMethod, params: Optional[NamedTuple] = None, timeout=None) -> RestResponse:
        timeout = timeout or conf.REST_TIMEOUT

        try:
            if method.value.version == conf.ApiVersion.v1:
                response = self._call_rest(method, params, timeout)
            else:
                response = self._call_jsonrpc(method, params, timeout)
        except Exception as e:
            logging.warning(f"REST call fail method_name({method.value.name}), caused by : {type(e)}, {e}")
            raise
        else:
            utils.logger.spam(f"REST call complete method_name({method.value.name})")
            return response

    async def call_async(self, method: RestMethod, params: Optional[NamedTuple] = None, timeout=None) -> RestResponse:
        timeout = timeout or conf.REST_TIMEOUT

        try:
            if method.value.version == conf.ApiVersion.v1:
                response = await self._call_async_rest(method, params, timeout)
            else:
                response = await self._call_async_jsonrpc(method, params, timeout)
        except Exception as e:
            logging.warning(f"REST call async fail method_name({method.value.name}), caused by : {type(e)}, {e}")
            raise
        else:
            utils.logger.spam(f"REST call async complete method_name({method.value.name})")
            return response

    def _call_rest(self, method: RestMethod, params: Optional[NamedTuple], timeout):
        url = self.create_url(method, params)
        body = self._create_rest_body(method, params)
        response = requests.request(method.value.http_method, url=url, json=body, timeout=timeout)
        return self._to_rest_response(method, response.status_code, self._json_or_none(response))

    def _call_jsonrpc(self, method: RestMethod, params: Optional[NamedTuple], timeout):
        response = requests.post(url=self.create_url(method, params),
                                 json=self.create_params(method, params),
                                 timeout=timeout)
        return self._to_jsonrpc_response(method, response.status_code, self._json_or_none(response))

    async def _call_async_rest(self, method: RestMethod, params: Optional[NamedTuple], timeout):
        url = self.create_url(method, params)
        body = self._create_rest_body(method, params)
        async with ClientSession(timeout=ClientTimeout(total=timeout)) as session:
            async with session.request(method.value.http_method, url, json=body) as response:
                data = await response.json(content_type=None) if response.content_length != 0 else None
                return self._to_rest_response(method, response.status, data)

    async def _call_async_jsonrpc(self, method: RestMethod, params: Optional[NamedTuple], timeout):
        url = self.create_url(method, params)
        async with ClientSession(timeout=ClientTimeout(total=timeout)) as session:
            async with session.post(url, json=self.create_params(method, params)) as response:
                data = await response.json(content_type=None)
                return self._to_jsonrpc_response(method, response.status, data)

    def create_url(self, method: RestMethod, params: Optional[NamedTuple] = None):
        if method.value.version == conf.ApiVersion.v1:
            path = method.value.name
            if params is not None and "{" in path:
                # noinspection PyProtectedMember
                path = path.format(**params._asdict())
            return self._target + path
        return self._target

    def create_params(self, method: RestMethod, params: Optional[NamedTuple]):
        if method.value.version == conf.ApiVersion.v1:
            return self._create_rest_body(method, params)
        else:
            return self._create_jsonrpc_params(method, params)

    def _create_rest_body(self, method: RestMethod, params: Optional[NamedTuple]):
        if method.value.http_method == "GET" or params is None:
            return None
        # noinspection PyProtectedMember
        return params._asdict()

    def _create_jsonrpc_params(self, method: RestMethod, params: Optional[NamedTuple]):
        # noinspection PyProtectedMember
        params = params._asdict() if params else None
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        return jsonrpc_request(method.value.name, params=params) if params else jsonrpc_request(method.value.name)

    @staticmethod
    def _json_or_none(response):
        try:
            return response.json()
        except ValueError:
            return None

    @staticmethod
    def _to_rest_response(method: RestMethod, status: int, data) -> RestResponse:
        result_key = method.value.result_key
        if result_key and isinstance(data, dict):
            data = data.get(result_key)
        return RestResponse(status, data)

    @staticmethod
    def _to_jsonrpc_response(method: RestMethod, status: int, data) -> RestResponse:
        if data is None:
            return RestResponse(status)

        if isinstance(data, list):
            raise NotImplementedError(f"Received batch response. Data: {data}")

        parsed = jsonrpc_parse(data)

        if not isinstance(parsed, Ok):
            logging.debug(f"JSON-RPC error response method_name({method.value.name}): {parsed}")
            return RestResponse(parsed.code, None)

        result = parsed.result
        result_key = method.value.result_key
        if result_key and isinstance(result, dict):
            result = result.get(result_key)
        return RestResponse(status, result)
