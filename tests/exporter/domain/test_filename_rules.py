import unittest

from framer_export.exporter.domain.errors import InvalidSiteUrlError
from framer_export.exporter.domain.rules import (
    archive_filename,
    build_path_map,
    find_filename_collisions,
    normalize_url,
    parse_site_url,
    to_filename,
    url_origin,
    url_pathname,
)


class ToFilenameTests(unittest.TestCase):
    def test_root_and_blank_paths_map_to_index(self):
        for pathname in ("/", "", "   "):
            with self.subTest(pathname=pathname):
                self.assertEqual(to_filename(pathname), "index.html")

    def test_nested_path_is_flattened(self):
        self.assertEqual(to_filename("/blog/my-post/"), "blog-my-post.html")

    def test_duplicate_separators_collapse(self):
        self.assertEqual(to_filename("/a//b"), "a-b.html")

    def test_unsafe_characters_become_dashes(self):
        self.assertEqual(to_filename("/about us"), "about-us.html")
        self.assertEqual(to_filename("/café"), "caf-.html")
        self.assertEqual(to_filename("/file.name"), "file-name.html")

    def test_slashes_only_fall_back_to_index(self):
        self.assertEqual(to_filename("///"), "index.html")

    def test_result_always_has_stem_and_html_extension(self):
        samples = ["/", "", " ", "/x", "//", "/a/b/c/", "/?", "/%20", "/-/", "/日本語", "\t/\t"]
        for pathname in samples:
            with self.subTest(pathname=pathname):
                filename = to_filename(pathname)
                self.assertTrue(filename.endswith(".html"))
                self.assertGreater(len(filename), len(".html"))


class ParseSiteUrlTests(unittest.TestCase):
    def test_valid_url_yields_origin_and_hostname(self):
        site = parse_site_url("  https://Example.framer.website/about  ")
        self.assertEqual(site.origin, "https://example.framer.website")
        self.assertEqual(site.hostname, "example.framer.website")
        self.assertEqual(site.url, "https://example.framer.website/about")

    def test_default_port_is_dropped_and_custom_port_kept(self):
        self.assertEqual(parse_site_url("https://example.com:443").origin, "https://example.com")
        self.assertEqual(parse_site_url("http://localhost:3000/").origin, "http://localhost:3000")

    def test_malformed_input_is_rejected(self):
        for raw in ("", "   ", "example.com", "https://", "http://example.com:99999"):
            with self.subTest(raw=raw):
                with self.assertRaises(InvalidSiteUrlError) as ctx:
                    parse_site_url(raw)
                self.assertEqual(str(ctx.exception), "Invalid URL")

    def test_internationalized_host_is_serialized_as_punycode(self):
        site = parse_site_url("https://例子.com/café")
        self.assertEqual(site.origin, "https://xn--fsqu00a.com")
        self.assertEqual(site.hostname, "xn--fsqu00a.com")
        self.assertEqual(site.url, "https://xn--fsqu00a.com/caf%C3%A9")
        self.assertEqual(archive_filename(site.hostname), "framer-export-xn--fsqu00a.com.zip")

    def test_unencodable_host_is_rejected(self):
        with self.assertRaises(InvalidSiteUrlError) as ctx:
            parse_site_url("https://" + "é" * 70 + ".com")
        self.assertEqual(str(ctx.exception), "Invalid URL")

    def test_non_http_scheme_is_rejected(self):
        for raw in ("ftp://example.com", "mailto:someone@example.com", "javascript:alert(1)"):
            with self.subTest(raw=raw):
                with self.assertRaises(InvalidSiteUrlError) as ctx:
                    parse_site_url(raw)
                self.assertEqual(str(ctx.exception), "URL must start with http or https")


class UrlHelperTests(unittest.TestCase):
    def test_url_origin(self):
        self.assertEqual(url_origin("https://EXAMPLE.com/a?b=1"), "https://example.com")
        self.assertEqual(url_origin("http://example.com:80/"), "http://example.com")
        self.assertEqual(url_origin("https://example.com:8443/"), "https://example.com:8443")
        self.assertIsNone(url_origin("ftp://example.com/"))
        self.assertIsNone(url_origin("not a url"))
        self.assertIsNone(url_origin("http://[broken"))
        self.assertEqual(url_origin("https://例子.com/a"), "https://xn--fsqu00a.com")
        self.assertEqual(url_origin("https://xn--fsqu00a.com/a"), "https://xn--fsqu00a.com")

    def test_normalize_url_keeps_query_and_fragment(self):
        self.assertEqual(normalize_url("https://Example.com"), "https://example.com/")
        self.assertEqual(normalize_url("https://example.com/a?x=1#top"), "https://example.com/a?x=1#top")
        self.assertIsNone(normalize_url("/relative/only"))

    def test_url_pathname(self):
        self.assertEqual(url_pathname("https://example.com"), "/")
        self.assertEqual(url_pathname("https://example.com/blog/post?x=1"), "/blog/post")

    def test_url_pathname_is_percent_encoded(self):
        self.assertEqual(url_pathname("https://example.com/café"), "/caf%C3%A9")
        self.assertEqual(url_pathname("https://example.com/caf%C3%A9"), "/caf%C3%A9")
        self.assertEqual(url_pathname("https://example.com/about us"), "/about%20us")
        self.assertEqual(normalize_url("https://例子.com/café"), "https://xn--fsqu00a.com/caf%C3%A9")

    def test_build_path_map(self):
        path_map = build_path_map(
            [
                "https://example.com",
                "https://example.com/blog",
                "https://example.com/blog/my-post/",
            ]
        )
        self.assertEqual(
            path_map,
            {
                "/": "index.html",
                "/blog": "blog.html",
                "/blog/my-post/": "blog-my-post.html",
            },
        )

    def test_collisions_are_reported_not_disambiguated(self):
        path_map = build_path_map(["https://example.com/a-b", "https://example.com/a/b", "https://example.com/c"])
        self.assertEqual(path_map["/a-b"], "a-b.html")
        self.assertEqual(path_map["/a/b"], "a-b.html")
        self.assertEqual(find_filename_collisions(path_map), {"a-b.html": ("/a-b", "/a/b")})

    def test_archive_filename(self):
        self.assertEqual(archive_filename("example.framer.website"), "framer-export-example.framer.website.zip")
