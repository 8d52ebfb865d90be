from lxml import etree


def xmlstring(root):
    if isinstance(root, str):
        return root
    if isinstance(root, bytes):
        return root.decode("utf-8", errors="replace")
    if hasattr(root, "xmlelement"):
        root = root.xmlelement()
    try:
        return etree.tostring(root, pretty_print=True).decode("utf-8")
    except TypeError:
        return str(root)


def dump_communication(request, response) -> str:
    """
    Write a request/response pair to a temporary file, for debugging
    servers.  Returns the file name.
    """
    import datetime
    from tempfile import NamedTemporaryFile

    with NamedTemporaryFile(prefix="davclientcomm", delete=False) as commlog:
        commlog.write(b"=" * 80 + b"\n")
        commlog.write(f"{datetime.datetime.now():%FT%H:%M:%S}".encode("utf-8"))
        commlog.write(b"\n====>\n")
        commlog.write(f"{request.method} {request.url}\n".encode("utf-8"))
        commlog.write(
            b"\n".join(f"{x}: {request.headers[x]}".encode("utf-8") for x in request.headers)
        )
        commlog.write(b"\n\n")
        commlog.write(request.body)
        commlog.write(b"<====\n")
        commlog.write(f"{response.status}\n".encode("utf-8"))
        commlog.write(
            b"\n".join(f"{x}: {response.headers[x]}".encode("utf-8") for x in response.headers)
        )
        commlog.write(b"\n\n")
        commlog.write(response.body)
        commlog.write(b"\n")
    return commlog.name
