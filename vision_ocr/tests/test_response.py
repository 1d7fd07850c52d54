import copy
import unittest

from vision_ocr.dto.full_text_annotation import FullTextAnnotation
from vision_ocr.dto.text_annotation import TextAnnotation
from vision_ocr.processor.response import Response, decode
from vision_ocr.tests.utils_helpers import (
    DOCUMENT_TEXT_RESPONSE,
    ENGINE_ANNOTATION,
    ERROR_RESPONSE,
    IMAGE_ERROR_RESPONSE,
    document_response_without,
    load_payload,
)
from vision_ocr.utils.errors import SchemaError, ServiceError


class TestDecode(unittest.TestCase):

    def test_decode_returns_model(self):
        annotation = decode(TextAnnotation, load_payload(ENGINE_ANNOTATION))
        self.assertIsInstance(annotation, TextAnnotation)

    def test_decode_wraps_validation_error(self):
        with self.assertRaises(SchemaError) as ctx:
            decode(TextAnnotation, {"description": 3}, path="here")
        self.assertEqual(ctx.exception.path, "here")
        self.assertIn("TextAnnotation", str(ctx.exception))

    def test_decode_rejects_non_object(self):
        with self.assertRaises(SchemaError):
            decode(FullTextAnnotation, None)


class TestResponse(unittest.TestCase):

    def setUp(self) -> None:
        self.payload = load_payload(DOCUMENT_TEXT_RESPONSE)
        self.response = Response.from_payload(self.payload)

    def test_text_annotations(self):
        annotations = self.response.text_annotations()
        self.assertEqual([a.description for a in annotations], ["GO ON\n", "GO", "ON"])
        self.assertEqual(annotations[0].locale, "en")
        self.assertIsNone(annotations[1].locale)
        self.assertEqual(annotations[2].bounding_poly.left_top().x, 120)

    def test_full_text_annotation(self):
        document = self.response.full_text_annotation()
        words = list(document.iter_words())
        self.assertEqual(len(document.pages), 1)
        self.assertEqual(len(document.pages[0].blocks), 1)
        self.assertEqual(len(document.pages[0].blocks[0].paragraphs), 1)
        self.assertEqual(len(words), 2)
        self.assertEqual([w.confidence for w in words], [0.9, 0.95])

    def test_accessors_are_independent_and_repeatable(self):
        before = copy.deepcopy(self.payload)
        document = self.response.full_text_annotation()
        first = self.response.text_annotations()
        second = self.response.text_annotations()
        self.assertEqual(first, second)
        self.assertIsNot(first[0], second[0])
        self.assertEqual(self.response.full_text_annotation(), document)
        self.assertEqual(self.response.payload, before)

    def test_missing_text_annotations(self):
        response = Response.from_payload(document_response_without("responses", 0, "textAnnotations"))
        with self.assertRaises(SchemaError) as ctx:
            response.text_annotations()
        self.assertEqual(str(ctx.exception), "text_annotations must be array")
        # the other accessor is unaffected
        self.assertEqual(len(response.full_text_annotation().pages), 1)

    def test_text_annotations_not_array(self):
        self.payload["responses"][0]["textAnnotations"] = {"description": "GO"}
        with self.assertRaises(SchemaError) as ctx:
            Response.from_payload(self.payload).text_annotations()
        self.assertEqual(str(ctx.exception), "text_annotations must be array")

    def test_empty_responses(self):
        response = Response.from_payload({"responses": []})
        with self.assertRaises(SchemaError):
            response.text_annotations()
        with self.assertRaises(SchemaError):
            response.full_text_annotation()

    def test_bad_element_fails_whole_call(self):
        self.payload["responses"][0]["textAnnotations"][2]["boundingPoly"]["vertices"].pop()
        with self.assertRaises(SchemaError) as ctx:
            Response.from_payload(self.payload).text_annotations()
        self.assertEqual(ctx.exception.path, "responses[0].textAnnotations[2]")

    def test_wrongly_typed_coordinates_are_rejected(self):
        for vertex in ({"x": "10", "y": 20}, {"x": 10, "y": True}):
            with self.subTest(vertex=vertex):
                payload = load_payload(DOCUMENT_TEXT_RESPONSE)
                payload["responses"][0]["textAnnotations"][1]["boundingPoly"]["vertices"][0] = vertex
                with self.assertRaises(SchemaError) as ctx:
                    Response.from_payload(payload).text_annotations()
                self.assertEqual(ctx.exception.path, "responses[0].textAnnotations[1]")

    def test_wrongly_typed_tree_values_are_rejected(self):
        block = self.payload["responses"][0]["fullTextAnnotation"]["pages"][0]["blocks"][0]
        for member, value in (("confidence", "0.5"), ("confidence", True), ("blockType", 1)):
            with self.subTest(member=member, value=value):
                payload = copy.deepcopy(self.payload)
                payload["responses"][0]["fullTextAnnotation"]["pages"][0]["blocks"][0][member] = value
                with self.assertRaises(SchemaError):
                    Response.from_payload(payload).full_text_annotation()
        self.assertEqual(block["confidence"], 0.92)

    def test_string_coordinate_in_tree_is_rejected(self):
        vertices = self.payload["responses"][0]["fullTextAnnotation"]["pages"][0]["blocks"][0]["boundingBox"]["vertices"]
        vertices[1] = {"x": "120", "y": 20}
        with self.assertRaises(SchemaError):
            Response.from_payload(self.payload).full_text_annotation()

    def test_missing_full_text_annotation(self):
        response = Response.from_payload(document_response_without("responses", 0, "fullTextAnnotation"))
        with self.assertRaises(SchemaError) as ctx:
            response.full_text_annotation()
        self.assertEqual(ctx.exception.path, "responses[0].fullTextAnnotation")
        self.assertEqual(len(response.text_annotations()), 3)

    def test_malformed_full_text_annotation(self):
        del self.payload["responses"][0]["fullTextAnnotation"]["pages"][0]["blocks"][0]["paragraphs"][0]["words"]
        with self.assertRaises(SchemaError) as ctx:
            Response.from_payload(self.payload).full_text_annotation()
        self.assertIn("words", str(ctx.exception))

    def test_degenerate_polygon_is_schema_error(self):
        vertices = self.payload["responses"][0]["fullTextAnnotation"]["pages"][0]["blocks"][0]["boundingBox"]["vertices"]
        del vertices[1:]
        with self.assertRaises(SchemaError):
            Response.from_payload(self.payload).full_text_annotation()


class TestResponseErrors(unittest.TestCase):

    def test_top_level_error(self):
        payload = load_payload(ERROR_RESPONSE)
        with self.assertRaises(ServiceError) as ctx:
            Response.from_payload(payload)
        error = ctx.exception
        self.assertEqual(error.code, 401)
        self.assertEqual(error.status, "UNAUTHENTICATED")
        self.assertIn("invalid authentication credentials", str(error))
        self.assertEqual(error.error, payload["error"])

    def test_per_image_error(self):
        with self.assertRaises(ServiceError) as ctx:
            Response.from_payload(load_payload(IMAGE_ERROR_RESPONSE))
        self.assertEqual(ctx.exception.message, "Bad image data.")

    def test_non_object_error_member_is_not_service_error(self):
        payload = load_payload(DOCUMENT_TEXT_RESPONSE)
        payload["error"] = None
        response = Response.from_payload(payload)
        self.assertEqual(len(response.text_annotations()), 3)

    def test_payload_must_be_object(self):
        with self.assertRaises(SchemaError):
            Response.from_payload([])


if __name__ == "__main__":
    unittest.main()
