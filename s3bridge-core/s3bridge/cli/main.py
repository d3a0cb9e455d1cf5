import json
import logging
import os
import sys
import traceback
from typing import Optional

import click

from s3bridge import config
from s3bridge.constants import ENV_ACCESS_KEY_ID, ENV_SECRET_ACCESS_KEY, VERSION
from s3bridge.s3.client import S3Client

from .exceptions import CLIError


class S3BridgeCliGroup(click.Group):
    """
    A Click group used for the top-level ``s3bridge`` command group. It wraps all errors of the client into a
    CLIError (for a unified error message) and leaves the click exceptions alone.
    """

    def invoke(self, ctx: click.Context):
        try:
            return super(S3BridgeCliGroup, self).invoke(ctx)
        except click.exceptions.Exit:
            # raise Exit exceptions unmodified (e.g., raised on --help)
            raise
        except click.ClickException:
            if ctx and ctx.params.get("debug"):
                click.echo(traceback.format_exc())
            raise
        except Exception as e:
            if ctx and ctx.params.get("debug"):
                click.echo(traceback.format_exc())
            raise CLIError.from_exception(e) from e


def _setup_cli_debug() -> None:
    from s3bridge.logging.setup import setup_logging_for_cli

    config.DEBUG = True
    os.environ["DEBUG"] = "1"

    setup_logging_for_cli(logging.DEBUG)


def _print_result(result) -> None:
    click.echo(json.dumps(result, indent=2))


@click.group(name="s3bridge", cls=S3BridgeCliGroup)
@click.version_option(version=VERSION, message="%(version)s")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option(
    "--access-key-id", envvar=ENV_ACCESS_KEY_ID, required=True, help="Access key id used for signing"
)
@click.option(
    "--secret-access-key",
    envvar=ENV_SECRET_ACCESS_KEY,
    required=True,
    help="Secret access key used for signing",
)
@click.option("--endpoint", help="Hostname of the storage service")
@click.pass_context
def s3bridge(
    ctx: click.Context,
    debug: bool,
    access_key_id: str,
    secret_access_key: str,
    endpoint: Optional[str],
) -> None:
    """
    Read and write objects of a bucket-based storage service.
    """
    if debug:
        _setup_cli_debug()
    else:
        from s3bridge.logging.setup import setup_logging_from_config

        setup_logging_from_config()

    ctx.obj = {
        "client": S3Client(endpoint=endpoint),
        "credentials": {
            "awsAccessKeyId": access_key_id,
            "secretAccessKey": secret_access_key,
        },
    }


@s3bridge.command(name="put", help="Upload an object")
@click.argument("bucket")
@click.argument("key")
@click.argument("file", type=click.File("rb"), default="-")
@click.option("--content-type", help="Content type of the object")
@click.option("--storage-class", help="Storage class of the object")
@click.option("--meta", multiple=True, help="Object metadata as name=value, can be repeated")
@click.pass_obj
def cmd_put(obj, bucket, key, file, content_type, storage_class, meta):
    metadata = {}
    for item in meta:
        name, _, value = item.partition("=")
        metadata[name] = value

    params = {
        **obj["credentials"],
        "bucketName": bucket,
        "objectKey": key,
        "object": file.read(),
        "contentType": content_type,
        "storageClass": storage_class,
        "meta": metadata,
    }
    _print_result(obj["client"].put_object(params))


@s3bridge.command(name="get", help="Download an object and print its content")
@click.argument("bucket")
@click.argument("key")
@click.option("--range", "byte_range", help="Byte range to download, e.g. bytes=0-99")
@click.option("--metadata", is_flag=True, help="Print the result with all metadata as JSON")
@click.pass_obj
def cmd_get(obj, bucket, key, byte_range, metadata):
    params = {
        **obj["credentials"],
        "bucketName": bucket,
        "objectKey": key,
        "range": byte_range,
    }
    result = obj["client"].get_object(params)
    if metadata:
        _print_result(result)
    else:
        sys.stdout.write(result.get("object", ""))


@s3bridge.command(name="delete", help="Delete an object")
@click.argument("bucket")
@click.argument("key")
@click.option("--mfa", help="Serial number and token of the MFA device")
@click.pass_obj
def cmd_delete(obj, bucket, key, mfa):
    params = {
        **obj["credentials"],
        "bucketName": bucket,
        "objectKey": key,
        "mfa": mfa,
    }
    _print_result(obj["client"].delete_object(params))


@s3bridge.command(name="ls", help="List the objects of a bucket")
@click.argument("bucket")
@click.option("--prefix", help="Only list keys starting with this prefix")
@click.option("--delimiter", help="Group keys by this delimiter")
@click.option("--marker", help="Start listing after this key")
@click.option("--max-keys", type=int, help="Maximum number of keys to return")
@click.pass_obj
def cmd_ls(obj, bucket, prefix, delimiter, marker, max_keys):
    params = {
        **obj["credentials"],
        "bucketName": bucket,
        "prefix": prefix,
        "delimiter": delimiter,
        "marker": marker,
        "maxKeys": max_keys,
    }
    _print_result(obj["client"].get_bucket(params))


def main():
    s3bridge()


if __name__ == "__main__":
    main()
